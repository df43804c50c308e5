"""Reader for chunked container files with KEY/VALUE metadata."""
