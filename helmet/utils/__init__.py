"""Utility functions for helmet"""

from .git_utils import (
    get_exact_tag,
    get_current_commit,
    get_current_branch,
    is_dirty,
    query_git_state,
)

from .pattern_utils import (
    compile_pattern,
    match_pattern,
    filter_names,
)

from .argv_utils import (
    coerce_value,
    parse_dotted_arguments,
    flatten,
    build_overrides,
)

from .hash_utils import hash_text

from .async_utils import run_async

__all__ = [
    "get_exact_tag",
    "get_current_commit",
    "get_current_branch",
    "is_dirty",
    "query_git_state",
    "compile_pattern",
    "match_pattern",
    "filter_names",
    "coerce_value",
    "parse_dotted_arguments",
    "flatten",
    "build_overrides",
    "hash_text",
    "run_async",
]
