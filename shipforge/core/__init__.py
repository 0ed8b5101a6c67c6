"""Core release operations: policy, resolution, checksums and publishing."""
