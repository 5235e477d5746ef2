"""Chat pipeline: facts, memory, prompt assembly, dispatch."""
