"""Input stage: reading article files and turning them into Articles."""

from .assembler import ArticleAssembler, parse_file_list, read_article_file
from .front_matter import extract_front_matter, validate_metadata

__all__ = [
    "ArticleAssembler",
    "extract_front_matter",
    "parse_file_list",
    "read_article_file",
    "validate_metadata",
]
