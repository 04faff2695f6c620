"""Configuration for the lead rules library."""
