"""SVG request pipeline components"""
