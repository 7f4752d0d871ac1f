this.layout("base")

this.section("head")
echo('<link rel="stylesheet" href="/about.css">\n')
this.append()

echo("<h1>", this.escape(title), "</h1>\n")
echo("<p>", this.escape(description), "</p>\n")
# Optional partial: renders nothing until someone adds sidebar.py
echo(this.insertif("sidebar"))
