"""Pali Reader: browse Pali texts and look up every word in the Digital Pali Dictionary."""

from palireader.version_info import __version__
