"""Cultural-evolution simulations on small-world social networks."""

__version__ = "0.1.0"
