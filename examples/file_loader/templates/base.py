echo("<!DOCTYPE html>\n<html>\n<head>\n")
echo("<title>", this.escape(title), " | ", this.escape(site_name), "</title>\n")
this.section("head")
echo('<link rel="stylesheet" href="/site.css">\n')
this.show()
echo("</head>\n<body>\n")
echo(this.insert("nav", {"nav_items": nav_items}))
echo("<main>\n", this.last_buffer(), "</main>\n")
echo("<footer>", this.supply("footer", "Powered by vellum"), "</footer>\n")
echo("</body>\n</html>\n")
