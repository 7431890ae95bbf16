"""
notionlinks.config.defaults - Built-in configuration values.
"""

from notionlinks.client import NOTION_API_BASE, NOTION_VERSION

DEFAULT_CONFIG = {
    "api": {
        "base_url": NOTION_API_BASE,
        "version": NOTION_VERSION,
        "timeout": 30.0,
        "max_retries": 3,
    },
    "backlinks": {
        # One page per candidate collection; larger collections under-report
        "query_page_size": 100,
        "search_page_size": 50,
        "mention_limit": 10,
    },
    "graph": {
        "depth": 1,
        "format": "text",
        "label_width": 30,
        "id_width": 8,
    },
}
