from __future__ import annotations
import re

_NON_WORD = re.compile(r"[^\w\s]")

def normalize(text: str) -> str:
    """Lower-case, drop punctuation, trim. 'Prime, Pizza!!' -> 'prime pizza'."""
    return _NON_WORD.sub("", text.lower()).strip()

def answers_match(guess: str, answer: str) -> bool:
    """Fuzzy match: either normalized string contains the other."""
    g, a = normalize(guess), normalize(answer)
    if not g or not a:
        return False
    return g in a or a in g
