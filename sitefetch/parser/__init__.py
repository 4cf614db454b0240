"""sitefetch.parser: разбор sitemap.xml и извлечение основного контента страниц."""
