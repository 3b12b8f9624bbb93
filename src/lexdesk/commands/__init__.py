"""Command bus package.

Named, payload-carrying commands let UI triggers invoke workflow logic
without holding references to it.
"""
