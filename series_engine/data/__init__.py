"""
Data ingestion module.

Date-key parsing, value coercion and series normalization for raw
observation arrays handed over by upstream fetchers.
"""
