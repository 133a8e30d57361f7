"""Query parameter parsing for JSON:API."""

from .query_params import Parameters, nest_query_params

__all__ = ["Parameters", "nest_query_params"]
