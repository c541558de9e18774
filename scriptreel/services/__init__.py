"""
Services - business logic and provider integrations.
"""
