"""
Test package for rest-do.

This package contains:
- test_paths.py: Path normalization tests
- test_registry.py: EndpointConfig and registry tests
- test_namespace.py: Namespace tree tests
- test_resolver.py: Argument resolution tests
- test_promise.py: ApiPromise tests
- test_client.py: Client dispatch tests
- test_transport.py: httpx transport tests
- test_admin.py: Administrative sub-namespace tests
- test_loader.py: Endpoint map file tests
- test_cli.py: Command line tests
- conftest.py: Pytest configuration and fixtures
"""
