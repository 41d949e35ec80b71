"""Web boundary layer.

- contracts: request/response models
- services: session-aware quoting
- controllers: FastAPI routers for quotes and the identity proxies

The quoting engine never calls the identity proxies; the two only share
this layer.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
