
class InvalidInput(ValueError):
    """Raised when partitions, matrices or match sets cannot be compared.

    Covers mismatched partition lengths, empty partitions, empty similarity
    matrices and empty match sets. Always raised before any partial result
    is produced.
    """
