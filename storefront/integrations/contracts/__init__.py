"""
Contracts (data models).

Defines the shapes exchanged with the Catalog Query Service. Both mock and
real clients return these models, so the controller and cache never handle
raw dicts.
"""
