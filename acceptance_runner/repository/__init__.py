"""Repository module - wiki page resolution."""

from .base import Document, DocumentRepository
from .renderer import render_page, rewrite_resource_paths
from .wiki_repository import REPORT_ASSETS, WikiRepository, is_suite_setup_or_teardown
from .wiki_tree import WikiPage, WikiTree, load_wiki_tree

__all__ = [
    "Document",
    "DocumentRepository",
    "REPORT_ASSETS",
    "WikiPage",
    "WikiRepository",
    "WikiTree",
    "is_suite_setup_or_teardown",
    "load_wiki_tree",
    "render_page",
    "rewrite_resource_paths",
]
