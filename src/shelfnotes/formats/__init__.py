# ABOUTME: Ebook file format readers used when cataloging books from files.
