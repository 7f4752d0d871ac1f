echo("<small>Payment due within 30 days.</small>\n")
