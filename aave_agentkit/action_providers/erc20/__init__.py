"""ERC-20 token constants and helpers shared by the token action providers."""
