"""Core settings, logging and exceptions for the Pokedex Proxy."""
