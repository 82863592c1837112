# Utils package for the storefront backend

from .slugs import generate_unique_slug


__all__ = ["generate_unique_slug"]
