"""
HTML parsing for the document model.
"""

from .html_parser import HTMLParser, parse_html, parse_fragment

__all__ = ['HTMLParser', 'parse_html', 'parse_fragment']
