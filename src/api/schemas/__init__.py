# This file marks the schemas package for request bodies, summaries and page envelopes.
# Modules are split by marketplace domain: accounts, catalog, orders, promotions and reviews.
