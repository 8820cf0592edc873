"""Infrastructure: cache backends, serializers, and database adapters."""
