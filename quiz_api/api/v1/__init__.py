from .router import rpc_router

__all__ = ["rpc_router"]
