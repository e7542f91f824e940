import unittest
import sys
import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

from bs4 import BeautifulSoup

# Add project root to sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from palireader.app import app

DN1 = """<html>
<head><title>Brahmajāla Sutta</title></head>
<body bgcolor="#FFFFFF">
<p class="centered">Evaṃ me sutaṃ [PTS Page 001] ekaṃ samayaṃ bhagavā.</p>
</body>
</html>
"""

class TestReaderApp(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.library = self.test_dir / 'library'
        (self.library / 'sutta' / 'dn').mkdir(parents=True)
        (self.library / 'sutta' / 'dn' / 'dn1.htm').write_text(DN1, encoding='utf-8')
        (self.library / 'vinaya.htm').write_text('<body>Vinaya</body>', encoding='utf-8')
        (self.library / 'readme.txt').write_text('not listed', encoding='utf-8')
        (self.test_dir / 'secret.htm').write_text('outside the library', encoding='utf-8')

        self._saved_config = dict(app.config)
        app.config.update(TESTING=True, LIBRARY_DIR=str(self.library))
        self.client = app.test_client()

    def tearDown(self):
        app.config.clear()
        app.config.update(self._saved_config)
        shutil.rmtree(self.test_dir)

    def test_index_lists_library(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        page = response.get_data(as_text=True)
        self.assertIn('Pali Texts Library', page)
        self.assertIn('/read/sutta', page)
        self.assertIn('vinaya.htm', page)
        self.assertNotIn('readme.txt', page)

    def test_read_root_redirects(self):
        response = self.client.get('/read/')
        self.assertEqual(response.status_code, 302)
        self.assertTrue(response.headers['Location'].endswith('/'))

    def test_directory_listing(self):
        response = self.client.get('/read/sutta/dn')
        self.assertEqual(response.status_code, 200)
        soup = BeautifulSoup(response.get_data(as_text=True), 'html.parser')
        self.assertEqual(soup.find('h1').get_text(strip=True), 'dn')
        cards = [a['href'] for a in soup.find_all('a', class_='file-card')]
        self.assertEqual(cards, ['/read/sutta/dn/dn1.htm'])
        crumbs = soup.find('nav', class_='breadcrumbs')
        self.assertEqual(crumbs.find('span', class_='current').get_text(), 'dn')
        self.assertIn('/read/sutta', [a['href'] for a in crumbs.find_all('a')])

    def test_read_document(self):
        response = self.client.get('/read/sutta/dn/dn1.htm')
        self.assertEqual(response.status_code, 200)
        soup = BeautifulSoup(response.get_data(as_text=True), 'html.parser')

        self.assertEqual(soup.find('title').get_text(), 'dn1 - Pali Reader')
        text = soup.find('div', class_='pali-text')
        self.assertIsNotNone(text.find('p', class_='centered'))

        words = [a.get_text() for a in text.find_all('a', class_='pali-word')]
        self.assertEqual(words, ['Evaṃ', 'me', 'sutaṃ', 'ekaṃ', 'samayaṃ', 'bhagavā'])
        self.assertEqual(text.find('span', class_='reference').get_text(), '[PTS Page 001]')
        # Head content is dropped from the fragment
        self.assertNotIn('Brahmajāla Sutta', text.get_text())

    def test_dictionary_url_from_config(self):
        app.config['DICTIONARY_URL'] = 'https://dict.example/'
        response = self.client.get('/read/vinaya.htm')
        self.assertIn('href="https://dict.example/?tab=dpd&q=vinaya"', response.get_data(as_text=True))

    def test_disabled_word_links(self):
        app.config['DISABLED_FEATURES'] = ['STD_WORD_LINKS']
        response = self.client.get('/read/vinaya.htm')
        page = response.get_data(as_text=True)
        self.assertNotIn('class="pali-word"', page)
        self.assertIn('Vinaya', page)

    def test_missing_file(self):
        response = self.client.get('/read/sutta/mn/mn1.htm')
        self.assertEqual(response.status_code, 404)

    def test_traversal_rejected(self):
        os.symlink(self.test_dir, self.library / 'escape')
        response = self.client.get('/read/escape/secret.htm')
        self.assertEqual(response.status_code, 400)

    def test_file_too_large(self):
        app.config['MAX_FILE_SIZE'] = 10
        response = self.client.get('/read/sutta/dn/dn1.htm')
        self.assertEqual(response.status_code, 413)

    def test_unreadable_file(self):
        with patch('palireader.app.read_document', side_effect=PermissionError('denied')):
            response = self.client.get('/read/vinaya.htm')
        self.assertEqual(response.status_code, 500)
        self.assertIn('Cannot read file', response.get_data(as_text=True))

    def test_stylesheet(self):
        response = self.client.get('/static/style.css')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.mimetype, 'text/css')
        self.assertIn('.pali-word', response.get_data(as_text=True))
        response.close()

    def test_version(self):
        from palireader.version_info import __version__
        response = self.client.get('/api/version')
        self.assertEqual(response.get_json(), {'version': __version__})

if __name__ == '__main__':
    unittest.main()
