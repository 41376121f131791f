"""Adapters: I/O against Tencent Cloud APIs and the CI runner."""
