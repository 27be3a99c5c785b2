"""Core domain: models, errors, seed catalogs and drift simulation."""
