"""Tournament domain: pairwise contender scoring and consensus."""
