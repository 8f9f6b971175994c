"""AI pipeline: retrieval, prompt composition, generation and classification."""
