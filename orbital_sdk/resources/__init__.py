"""Resources packaged with the Orbital SDK."""
