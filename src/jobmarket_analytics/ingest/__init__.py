"""HTTP client for the job-market API.

Fetches categories, cities and raw job-count observations and validates them
into models; no aggregation happens here.
"""
