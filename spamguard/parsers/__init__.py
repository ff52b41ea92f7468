"""spamguard/parsers — message sources."""
