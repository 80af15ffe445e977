"""Core building blocks shared by all neo-rbac features."""
