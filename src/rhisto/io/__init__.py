"""Reading samples from delimited text and writing histograms."""
