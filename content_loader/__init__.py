from .logger import logger
from .config import SiteConfig
from .loader import ContentLoader
from .models import LoadResult, LoadStatus, Post
from .parser import ContentParser, derive_title
from .sorting import compare_posts, compare_projects, sort_posts, sort_projects

__all__ = [
    "logger",
    "ContentLoader",
    "ContentParser",
    "LoadResult",
    "LoadStatus",
    "Post",
    "SiteConfig",
    "compare_posts",
    "compare_projects",
    "derive_title",
    "sort_posts",
    "sort_projects",
]
