"""Quickstart example for temploc.

Shows the render side: a Templater with two textdomains, the function
and filter call shapes, placeholders with modifiers and defaults, and a
Dutch catalog compiled in memory with Babel.

Note: Examples call the translation functions directly. A template engine
gets them from templater.template_vars() and templater.filters().
"""

from io import BytesIO

from babel.messages.catalog import Catalog
from babel.messages.mofile import write_mo
from babel.support import Translations

from temploc import GettextTranslator, MappingScope, Templater, TemplaterConfig
from temploc.runtime import RuntimeCall


def dutch_translations() -> Translations:
    catalog = Catalog(locale="nl", domain="shop")
    catalog.add("Hello {user}", "Hallo {user}")
    catalog.add(("one item", "{_count} items"), ("één artikel", "{_count} artikelen"))
    catalog.add("Total: {price %.2f}", "Totaal: {price %.2f}")
    buffer = BytesIO()
    write_mo(buffer, catalog)
    buffer.seek(0)
    return Translations(buffer, domain="shop")


# Example 1: Function shape
print("=" * 50)
print("Example 1: Function Shape")
print("=" * 50)

templater = Templater(TemplaterConfig(include_path=("shop", "admin")))
templater.add_textdomain("shop", function="loc")
templater.add_textdomain("admin", function="L", only_in_directory="admin")

variables = {"user": "Ann <ann@example.com>"}
functions = templater.template_vars(MappingScope(variables, name="cart.tt"))
loc = functions["loc"]

print(loc("Hello {user}"))
# Output: Hello Ann &lt;ann@example.com&gt;

print(loc("one item|{_count} items", 3))
# Output: 3 items

print(loc("Total: {price %.2f}", price=12.5))
# Output: Total: 12.50

# Example 2: Defaults and modifiers
print("\n" + "=" * 50)
print("Example 2: Defaults and Modifiers")
print("=" * 50)

print(loc("Welcome {guest //stranger}"))
# Output: Welcome stranger

print(loc("Download {size BYTES}", size=1536))
# Output: Download 1.5 KB

print(loc("Posted {when DT(RFC2822)}", when=1498436655))
# Output: Posted Mon, 26 Jun 2017 00:24:15 +0000

# Example 3: Filter shapes
print("\n" + "=" * 50)
print("Example 3: Filter Shapes")
print("=" * 50)

filters = templater.filters(MappingScope(variables, name="cart.tt"))
print(filters["loc"](user="Bob")("Hello {user}"))
# Output: Hello Bob

print(filters["loc"](_count=1)("one item|{_count} items"))
# Output: one item

print(filters["cols"]("th", "td")("Price:\t20 EUR"))
# Output: <th>Price:</th><td>20 EUR</td>

# Example 4: Translation
print("\n" + "=" * 50)
print("Example 4: Dutch Catalog")
print("=" * 50)

translator = GettextTranslator({"nl": dutch_translations()})
dutch = Templater(TemplaterConfig(translate_to="nl"), translator=translator)
dutch.add_textdomain("shop")
loc_nl = dutch.template_vars()["loc"]

print(loc_nl("Hello {user}", user="Ann"))
# Output: Hallo Ann

print(loc_nl("one item|{_count} items", 1))
# Output: één artikel

print(loc_nl("one item|{_count} items", 4))
# Output: 4 artikelen

print(loc_nl("Total: {price %.2f}", price=7, _lang="en"))
# Output: Total: 7.00

# Example 5: Collected problems
print("\n" + "=" * 50)
print("Example 5: Errors")
print("=" * 50)

text, errors = templater.formatter.format_call(
    RuntimeCall("Hi {name}, {size NOPE}", params={"size": 10}, label="mail.tt")
)
print(repr(text))
# Output: 'Hi , 10'
for error in errors:
    print(f"  {error}")
# Output:
#   Missing key 'name' in format 'Hi {name}, {size NOPE}', in mail.tt
#   Unknown modifier 'NOPE' for 'size'
