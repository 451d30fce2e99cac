"""Credential-injecting proxy for the Speedy shipping API."""
