echo("<nav>\n")
for item in nav_items:
    echo('  <a href="', this.escape(item["url"]), '">', this.escape(item["label"]), "</a>\n")
echo("</nav>\n")
