"""
Source Code Root Module

This module serves as the root for the source code of the Consul health
client.

Layer Structure:
- Domain: Health records, status vocabulary and aggregation rules
- Application: Health facade, use cases and wire DTOs
- Infrastructure: Consul HTTP transport and health endpoint gateway
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, command line entry point and configuration
"""
