"""
TextSearch - interactive TF-IDF search over a directory of plain-text documents.
"""
