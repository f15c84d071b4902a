# This file marks the services package.
# Services hold the storage calls behind each endpoint so routers stay transport-only.
