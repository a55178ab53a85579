"""
Features Module - Self-contained feature units.

- auth: bearer token to owner id
- database: Supabase repositories
- journaling: journal aggregation and the service that drives it
"""
