"""Authorization policies: permission catalog, account types and visibility rules."""
