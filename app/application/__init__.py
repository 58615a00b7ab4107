"""Application layer: interfaces, services, use cases.

Depends on domain and protocol definitions (DIP). Infrastructure
implements the interfaces (record source, cache, token client, mailer).
"""
