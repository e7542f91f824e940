"""
Content transformer for Pali documents.

Takes the raw text of an .htm document, isolates its body and turns every
Pali word into a lookup link to the Digital Pali Dictionary. HTML tags and
bracketed references such as [PTS Page 001] are left alone.
"""

import re
import unicodedata
from typing import Iterator, List, Tuple
from urllib.parse import quote_plus

from markupsafe import escape

DEFAULT_DICTIONARY_URL = "https://dpdict.net/"
DEFAULT_DICTIONARY_TAB = "dpd"

BODY_OPEN_PATTERN = re.compile(r'<body', re.IGNORECASE)
BODY_CLOSE_PATTERN = re.compile(r'</body>', re.IGNORECASE)

APOSTROPHES = ("'", "’")
QUOTE_CHARS = "'\"‘’“”"


def html_escape(text: str) -> str:
    """Escape &, <, >, ' and " using numeric entities for the quotes."""
    return str(escape(text))


def is_pali_char(ch: str) -> bool:
    """Letters plus nonspacing marks (combining diacritics)."""
    category = unicodedata.category(ch)
    return category.startswith('L') or category == 'Mn'


def is_word_char(ch: str) -> bool:
    return is_pali_char(ch) or ch in APOSTROPHES


def contains_letter(text: str) -> bool:
    return any(unicodedata.category(ch).startswith('L') for ch in text)


def normalize_word(word: str) -> str:
    """Lookup key for a token: lowercased with outer quotes trimmed."""
    return word.lower().strip(QUOTE_CHARS)


def build_lookup_url(key: str, base_url: str = DEFAULT_DICTIONARY_URL,
                     tab: str = DEFAULT_DICTIONARY_TAB) -> str:
    return f"{base_url}?tab={quote_plus(tab)}&q={quote_plus(key)}"


def find_delimited(text: str, opener: str, closer: str) -> Iterator[Tuple[int, int]]:
    """
    Yield (start, end) for each opener, one or more non-closer characters,
    closer, scanning left to right without overlap.

    Equivalent to finditer over e.g. r'<[^>]+>' but linear on unclosed
    openers: once no closer remains, no later opener can match either.
    """
    pos = 0
    while True:
        start = text.find(opener, pos)
        if start == -1:
            return
        end = text.find(closer, start + 1)
        if end == -1:
            return
        if end == start + 1:
            # Empty pair such as <> or []
            pos = start + 1
            continue
        yield start, end + 1
        pos = end + 1


def extract_body(content: str) -> str:
    """
    Return the text between the opening <body ...> tag and the last </body>.

    Missing markers fall back to the start/end of the text. An opening tag
    that is never closed leaves the region starting at the tag itself.
    """
    start = 0
    open_match = BODY_OPEN_PATTERN.search(content)
    if open_match:
        start = open_match.start()
        tag_end = content.find('>', start)
        if tag_end != -1:
            start = tag_end + 1

    end = len(content)
    for close_match in BODY_CLOSE_PATTERN.finditer(content):
        end = close_match.start()

    if end < start:
        end = len(content)

    return content[start:end]


def process_words(text: str, base_url: str = DEFAULT_DICTIONARY_URL,
                  tab: str = DEFAULT_DICTIONARY_TAB) -> str:
    """Wrap each word of a tag-free, reference-free span in a lookup link."""
    out: List[str] = []
    i = 0
    n = len(text)

    while i < n:
        if not is_word_char(text[i]):
            # Characters between words are written through unescaped
            out.append(text[i])
            i += 1
            continue

        word_start = i
        while i < n and is_word_char(text[i]):
            i += 1
        word = text[word_start:i]

        key = normalize_word(word)
        if key and contains_letter(key):
            out.append(
                f'<a href="{build_lookup_url(key, base_url, tab)}" '
                f'class="pali-word" target="other">{html_escape(word)}</a>'
            )
        else:
            out.append(html_escape(word))

    return ''.join(out)


def process_text_segment(text: str, base_url: str = DEFAULT_DICTIONARY_URL,
                         tab: str = DEFAULT_DICTIONARY_TAB) -> str:
    """Style [references] and link the words around them."""
    out: List[str] = []
    last_end = 0

    for start, end in find_delimited(text, '[', ']'):
        if start > last_end:
            out.append(process_words(text[last_end:start], base_url, tab))
        out.append(f'<span class="reference">{html_escape(text[start:end])}</span>')
        last_end = end

    if last_end < len(text):
        out.append(process_words(text[last_end:], base_url, tab))

    return ''.join(out)


def make_words_clickable(content: str, base_url: str = DEFAULT_DICTIONARY_URL,
                         tab: str = DEFAULT_DICTIONARY_TAB) -> str:
    """Keep tags verbatim and link the words in the text between them."""
    out: List[str] = []
    last_end = 0

    for start, end in find_delimited(content, '<', '>'):
        if start > last_end:
            out.append(process_text_segment(content[last_end:start], base_url, tab))
        out.append(content[start:end])
        last_end = end

    if last_end < len(content):
        out.append(process_text_segment(content[last_end:], base_url, tab))

    return ''.join(out)


def process_htm_content(content: str, base_url: str = DEFAULT_DICTIONARY_URL,
                        tab: str = DEFAULT_DICTIONARY_TAB) -> str:
    """Body isolation followed by word linking."""
    return make_words_clickable(extract_body(content), base_url, tab)
