"""
Preprocessing module for text processing in the search engine.
Includes tokenization, lowercase conversion and stop word filtering.
"""
