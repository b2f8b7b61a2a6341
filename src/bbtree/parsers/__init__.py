#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/parsers/__init__.py
"""Matching engine for BBCode rules.

Modules
-------
- ``inline``: start/stop token matching inside one text span
- ``params``: ``[tag=param]`` extraction layered on inline matching
- ``block``: line-oriented matching between start and stop markers
- ``bbcode``: the host parser that runs the block and inline passes

Import the parser from ``bbtree.parsers.bbcode`` (or ``bbtree.BBCodeParser``).
"""
