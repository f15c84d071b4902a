"""
Root package of the marketplace service: `src.api` holds the HTTP layer, `src.common`
the process settings, logging and schema bootstrap helpers.
"""
