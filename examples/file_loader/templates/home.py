this.layout("base")

echo("<h1>", this.escape(title), "</h1>\n")
echo("<p>", this.escape(message), "</p>\n")
