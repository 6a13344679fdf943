"""Path algorithms: SPF, label bookkeeping, overlap evaluation, OnePass+."""
