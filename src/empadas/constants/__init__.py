"""Static storefront data."""
