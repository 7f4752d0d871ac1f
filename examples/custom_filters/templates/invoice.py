echo("<h1>Invoice for ", T.filter("trim|title", customer), "</h1>\n")

echo("<ul>\n")
for item in items:
    line_total = item["price"] * item["qty"]
    echo("  <li>", T.escape(item["name"]), " x", item["qty"], ": ", T.filter("money", line_total), "</li>\n")
echo("</ul>\n")

echo("<p>Total: ", T.filter("money", total), " (", T.filter("money", total, [["€"]]), ")</p>\n")
echo("<p>", item_count, " ", T.pluralize(item_count, "item", "items"), "</p>\n")
if T.is_prime(item_count):
    echo("<p>Item count is prime</p>\n")

echo(T.Tinsertif("terms"))
