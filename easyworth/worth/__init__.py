"""Network collaborators: worths RPC node, price feed, WorthConnect."""
