"""Catalog Core.

Product catalog service: products own SKU variants, grouped under
categories, with soft deletion and aggregate listings.
"""
