"""
Newsdesk Modules
================

Feature blueprints registered by the Newsdesk extension.
"""
