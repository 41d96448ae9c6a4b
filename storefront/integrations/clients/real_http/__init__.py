"""
Real HTTP integration clients.

These clients communicate with the deployed Catalog Query Service over HTTP.
They implement the same CatalogClient interface as the mock clients and
return data shaped according to storefront/integrations/contracts/*.
"""
