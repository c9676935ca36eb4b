"""
CMS Publisher - publish Markdown articles to a headless CMS.

This package reads Markdown files with YAML front matter, renders them to
HTML and creates or updates the matching entries in a microCMS-style REST
API, keyed by the external article id in the front matter.

Main entry point is the CLI via the `cms-publisher` command.

Example:
    $ cms-publisher -f articles/a.md,articles/b.md -w .
"""

__all__ = ["__version__", "Article", "ArticleAssembler", "CMSClient", "Publisher", "run_publish"]
__version__ = "0.1.0"

from .cms.client import CMSClient
from .core.types import Article
from .input.assembler import ArticleAssembler
from .publisher import Publisher
from .runner import run_publish
