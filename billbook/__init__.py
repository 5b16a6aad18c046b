"""GST bill book: bill calculation, local storage and printing."""
