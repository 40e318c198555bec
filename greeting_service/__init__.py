"""Stateless "Hello World" HTTP service deployed as replicas on Kubernetes (EKS)."""
