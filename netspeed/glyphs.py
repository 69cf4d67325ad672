def surrogatepass(code):
    return code.encode('utf-16', 'surrogatepass').decode('utf-16')

# Arrows
arrow_down     = '↓'
arrow_up       = '↑'

# Network
md_alert       = surrogatepass('\udb80\udc26')
md_network     = surrogatepass('\udb81\udef3')
md_network_off = surrogatepass('\udb83\udc9b')

icon_spacer    = '  '
