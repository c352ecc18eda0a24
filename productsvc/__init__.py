"""Product and product-category HTTP service with a SQL store and a Redis cache."""

__version__ = "0.1.0"