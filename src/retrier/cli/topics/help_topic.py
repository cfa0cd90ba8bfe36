HELP = """
TOPIC: help
===========

How to use the retrier help system.

USAGE:
    retrier help              List all available topics
    retrier help <topic>      Show detailed info about a topic

TOPICS:
    retrier help overview     What retrier does and how a run proceeds
    retrier help policies     Policy descriptors, registration, errors
    retrier help settings     Environment variables

COMMANDS:
    retrier demo              Retry a random subject under constant_delay
    retrier policies          List registered policies
"""
