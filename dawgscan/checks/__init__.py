"""Evidence classifiers: header compliance, server stack, client markers, cookies."""
