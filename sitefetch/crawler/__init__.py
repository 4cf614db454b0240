"""sitefetch.crawler: очередь обхода, политика загрузки и извлечение ссылок."""
