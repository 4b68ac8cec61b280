"""Headless combat simulation: content, fighters, resolvers, agents and runners."""
