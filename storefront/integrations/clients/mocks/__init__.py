"""
Mock integration clients.

These clients answer without any network call. They are used when:
- the catalogue API is not running locally
- we want to test listing behaviour end-to-end

Mock clients must follow the SAME interface as real HTTP clients.
"""
