"""LogicBuilders commerce API: storefront, checkout, loyalty points and back office."""

__version__ = "1.0.0"
