"""
Persistence layer: Supabase repositories with in-process fallbacks
"""
