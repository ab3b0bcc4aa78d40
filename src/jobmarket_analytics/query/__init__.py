"""Query-term builders for the job-market stats endpoints."""
