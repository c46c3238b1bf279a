"""Cut-to-size panel storefront: quoting, price list, catalog and orders."""

__version__ = "0.1.0"
