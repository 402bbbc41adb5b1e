"""Application layer: ports and use cases of the durable logging core."""
