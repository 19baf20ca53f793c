"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Coordinate bounds, antimeridian, ring limits
- exceptions: Custom exception hierarchy
- geometry: shapely-backed geometry algebra (area, boundary, equality)
- ingress: HTTP request handling for the Azure Functions surface
"""
