"""Resolver functions backing the Query and Mutation root types."""
