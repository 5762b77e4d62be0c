"""Go release resolution and installation.

Fetches the release catalog from the Go download index, decides whether
the local toolchain is behind it, and replaces the installation with the
archive built for the host platform.
"""
