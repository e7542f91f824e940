import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.getcwd()))

from palireader.core.renderer import render_document

SAMPLE = "<html><body><p>Evaṃ me sutaṃ [PTS Page 001] ekaṃ samayaṃ bhagavā.</p></body></html>"

def debug_transformer(path=None):
    if path:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            text = f.read()
        print(f"Input: {path} ({len(text)} chars)")
    else:
        text = SAMPLE
        print(f"Input: {text}")

    html = render_document(text)

    print("\n--- Transformer Output (HTML) ---")
    print(html if len(html) < 4000 else html[:4000] + "\n...")
    print("--------------------------------\n")

    # Summarize what was linked
    from bs4 import BeautifulSoup
    soup = BeautifulSoup(html, 'html.parser')
    words = soup.find_all('a', class_='pali-word')
    refs = soup.find_all('span', class_='reference')
    print(f"Found {len(words)} word links, {len(refs)} references.")
    for a in words[:20]:
        print(f"Word: {a.get_text()!r} -> {a['href']}")
    for ref in refs[:20]:
        print(f"Reference: {ref.get_text()}")

if __name__ == "__main__":
    debug_transformer(sys.argv[1] if len(sys.argv) > 1 else None)
