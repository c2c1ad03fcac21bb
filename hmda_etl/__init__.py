"""HMDA loan application register ETL."""
