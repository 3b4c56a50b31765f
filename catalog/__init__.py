"""catalog/ -- Product and category collections for ScentShop.

Layer rule: catalog/ imports only stdlib and third-party libraries.
It does NOT import from api/ or auth/.
"""
