# Parameter Category 1 (Moisture).  Entries 192-254 are the local
# parameters of the Japan Meteorological Agency.
table_4_2_0_1 = {
'0':['Specific Humidity', 'kg/kg', 'SPFH'],
'1':['Relative Humidity', '%', 'RH'],
'7':['Precipitation Rate', 'kg m-2 s-1', 'PRATE'],
'8':['Total Precipitation', 'kg m-2', 'APCP'],
'200':['One Hour Precipitation', 'mm', 'RR1H'],
'208':['Soil Water Index', 'mm', 'SWI'],
'209':['Soil Water Index, First Tank', 'mm', 'SWI1'],
'210':['Soil Water Index, Second Tank', 'mm', 'SWI2'],
'217':['Landslide Warning Judgement Level', 'level', 'LSWJ'],
}
