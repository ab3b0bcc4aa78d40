"""jobmarket_analytics package.

Contains the analytics layer behind the job-market trends dashboard: building
facet filter queries, reducing dated job-count observations into per-category
statistics, shaping chart series, and resolving category colors.

Architecture:
- A thin HTTP client fetches raw observations from the job-market API
- Pure functions in `aggregate` reduce them into summaries and series
- Dask runs the per-category fetch-and-reduce steps concurrently
- Pydantic models validate everything crossing the API boundary
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
