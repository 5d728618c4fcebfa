"""Terminal presentation of search results."""
