table_originating_centers = {
'0':'WMO Secretariat',
'1':'Melbourne',
'2':'Melbourne',
'4':'Moscow',
'7':'US National Weather Service - NCEP (WMC)',
'34':'Japanese Meteorological Agency - Tokyo (RSMC)',
'40':'Korean Meteorological Administration',
'98':'European Centre for Medium-Range Weather Forecasts',
'255':'Missing Value',
}

table_originating_subcenters = {
'0':'None',
}
