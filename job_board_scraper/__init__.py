"""Workable job-board scraper: listing API crawl plus detail-page field resolution."""

__version__ = "0.1.0"
