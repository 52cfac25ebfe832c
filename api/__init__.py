"""HTTP layer: routers, middleware, dependencies and response helpers"""
