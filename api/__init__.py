"""
FastAPI RESTful API for the book catalog.

This package exposes the catalog over HTTP:
- Creating books with a generated identifier
- Listing books with status filtering, title ordering and offset/limit paging
- Updating a book's reading status
- Deleting books
"""
