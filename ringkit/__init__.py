"""Power-of-two ring buffers, queues, pools and spans."""

__version__ = "0.1.0"

__all__ = ["pool", "queue", "ring_base", "ring_buffer", "ring_views", "seq_buffer", "span", "status"]