# This file marks the routers package.
# Route modules are grouped by marketplace domain and mounted under the versioned API path.
