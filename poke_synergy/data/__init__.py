"""Static tables: type relations and strategy profiles."""
