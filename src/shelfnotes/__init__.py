# ABOUTME: Shelfnotes - a personal knowledge base of books and reading notes.
# ABOUTME: Package root; the engine lives in shelfnotes.core, storage in shelfnotes.db.
