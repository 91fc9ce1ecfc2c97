"""Paper notes service: turns arXiv PDFs into structured notes and searchable chunks."""
