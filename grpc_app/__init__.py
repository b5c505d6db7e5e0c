"""gRPC client layer for the RouteGuide demos.

This package hosts:
- The service schema (in `protos/`) and the modules generated from it (`generated`).
- The client binding and its interceptors.
- Thin mappers between dataset records, protobuf messages and console text.
"""
