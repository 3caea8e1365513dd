"""Smart India Hackathon problem statement enricher."""
