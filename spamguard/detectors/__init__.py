"""spamguard/detectors — classifier, pattern sets and batch scanner."""
