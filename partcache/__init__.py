"""Remote-entity cache and synchronization layer.

This package mirrors server-side objects (players, parties, guilds,
channels, messages, threads) as locally cached parts, keeps them in sync
with the remote REST API through async repositories, and applies gateway
push events to the nested cache graph.

Usage:
    python -m partcache                     # Freshen repositories from config
    python -m partcache --freshen players   # Freshen a single repository
"""
