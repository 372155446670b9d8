"""Building blocks for an AAC encoder: configuration, rate tables, TNS analysis and Huffman codebooks."""

__version__ = "0.1.0"