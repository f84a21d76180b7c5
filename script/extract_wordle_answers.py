"""
Scrape past Wordle answers from wordlehints.co.uk into a solver word list.

What it does:
- Downloads the page with historical answers.
- Parses visible text and extracts rows like: YYYY-MM-DD (Day) <num> <ANSWER>
- Captures the final 5-letter UPPERCASE token as the answer.
- De-duplicates while preserving calendar order and writes 6-byte records
  (5 uppercase letters + newline), the format packages.datasets loads.

Usage:
    python -m script.extract_wordle_answers --out data/answers.txt
    # or alphabetically sorted:
    python -m script.extract_wordle_answers --sort --out data/answers.txt
"""

import re
import argparse

import requests
from bs4 import BeautifulSoup  # pip install beautifulsoup4 requests

from packages.datasets import write_wordlist
from packages.engine import Word
from script.build_wordlist import unique_preserve_order

URL = "https://wordlehints.co.uk/wordle-past-answers/"
ROW_RE = re.compile(r"(\d{4}-\d{2}-\d{2})\s*\([A-Za-z]+\)\s*\d+\s+([A-Z]{5})\b")


def fetch_answers(url: str = URL) -> list[str]:
    r = requests.get(url, timeout=30)
    r.raise_for_status()
    soup = BeautifulSoup(r.text, "html.parser")
    text = soup.get_text("\n", strip=True)
    answers = [m.group(2) for m in ROW_RE.finditer(text)]
    return unique_preserve_order(answers)  # removes duplicates, keeps calendar order


def main():
    ap = argparse.ArgumentParser(description="Extract unique Wordle answers as a word list")
    ap.add_argument("--url", default=URL)
    ap.add_argument("--out", default="data/answers.txt")
    ap.add_argument("--sort", action="store_true", help="sort alphabetically instead of keeping "
                                                        "calendar order")
    args = ap.parse_args()

    answers = fetch_answers(args.url)
    if args.sort:
        answers = sorted(answers)

    write_wordlist([Word.from_text(a) for a in answers], args.out)
    print(f"Wrote {len(answers)} unique answers -> {args.out}")

if __name__ == "__main__":
    main()
