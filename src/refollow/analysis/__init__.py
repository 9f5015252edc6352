from refollow.analysis.aggregation import aggregate, assemble, build_list
from refollow.analysis.gate import CreatorRequirement, CreatorResolution, resolve_creators

__all__ = [
    "CreatorRequirement",
    "CreatorResolution",
    "aggregate",
    "assemble",
    "build_list",
    "resolve_creators",
]
